from importlib import import_module
from setuptools import setup

with open('README.rst') as f:
    readme = f.read()

setup(
    name='rpncalc',
    version=import_module('rpncalc').__version__,
    description='Reverse Polish notation calculator with a typed value stack',
    long_description=readme,
    long_description_content_type='text/x-rst',
    packages=['rpncalc'],
    include_package_data=True,
    install_requires=[
        'prompt_toolkit>=3.0.29',
        'Pygments',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Mathematics',
        'Topic :: Utilities',
    ],
    python_requires='>=3.6',
    entry_points={
        'console_scripts': [
            'rpncalc = rpncalc.repl:cli_main',
        ],
    },
)
