from setuptools import setup, find_packages

setup(
    name='gkectl',
    version='0.1.0',
    packages=find_packages(exclude=['gkectl.tests']),
    include_package_data=True,
    install_requires=[
        'typer',
        'pydantic>=2',
        'python-dotenv',
        'PyYAML',
        'jsonschema',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'gkectl=gkectl.cli:app'
        ]
    },
    author='Your Name',
    description='A small CLI for creating and deleting GKE clusters through gcloud',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)
