from setuptools import setup, find_packages

setup(
    name='dicestack',
    version='0.1.0',
    description='Stack-based evaluator for lexed tabletop dice expressions',
    license='MIT',

    packages=find_packages('src'),
    package_dir={'': 'src'},

    include_package_data=True,

    python_requires='>=3.8',
    install_requires=[
        'pyparsing>=3.0',
        'twisted>=22',
        'zope.interface>=5',
    ],
    extras_require={
        'dev': ['behave'],
    }
)
