from glob import glob
from setuptools import setup, find_packages


setup(
    name='rpcalc',
    version='1.0.0',
    description='RPN calculator',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=find_packages('src'),
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    python_requires='>=3.7',
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
