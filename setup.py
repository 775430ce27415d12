"""Setup script for tinfer."""
from setuptools import setup, find_packages  # type: ignore
import tinfer

setup(
    name='tinfer',
    version=tinfer.version,
    description='Constraint-based type inference for a tiny functional language',  # noqa
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    license='MIT',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Compilers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
    keywords='type-inference unification',
    packages=find_packages(),  # type: ignore
    python_requires='>=3.8',
    install_requires=[
        'typing-extensions>=4',
    ],
    extras_require={
        'test': ['coverage>=6.4.4', 'hypothesis>=6'],
        'dev': ['axblack==20220330', 'mypy>=1.1.1', 'pre-commit>=2.6.0'],
    },
    entry_points={
        'console_scripts': ['tinfer=tinfer.__main__:main'],
    },
)
