from glob import glob
from setuptools import setup


setup(
    name='scicalc',
    version='0.1.0',
    description='Scientific calculator expression engine',
    install_requires=[
        'regex',
        'prompt_toolkit',
        'numpy',
    ],
    packages=['scicalc'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'hypothesis',
            'flake8',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
