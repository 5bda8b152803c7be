from setuptools import find_packages, setup

setup(
    name='zusiclient',
    version='1.0.0',
    description='Client library for the Zusi 3 TCP protocol (node/attribute message trees)',
    author='',
    author_email='',
    packages=find_packages(include=['zusiclient', 'zusiclient.*']),
    python_requires='>=3.11',
    install_requires=[
        'construct>=2.10',
        'msgspec>=0.18',
        'transitions>=0.9',
    ],
    extras_require={
        'test': [
            'pytest>=7',
        ],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
)
