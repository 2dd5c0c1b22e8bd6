from setuptools import setup, find_packages

setup(
    name='fibo-add',
    version='0.1.0',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    install_requires=[
        'PyYAML>=6.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'fibo-demo=fibo_add.cli:main',
        ],
    },
    description='Integer addition and recursive Fibonacci numbers, with a demo CLI',
    long_description=open('README.md', encoding='utf-8').read(),
    long_description_content_type='text/markdown',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'Intended Audience :: Developers',
    ],
    keywords='fibonacci addition recursion example',
    python_requires='>=3.8',
)
