from setuptools import setup, find_packages

setup(
    name="pydaptivemapper",
    packages=find_packages(
        include=["pydaptivemapper", "pydaptivemapper.*"]),
    version='0.1.0',
    description="Online x <-> y linear mapping with a generic Recursive Least Squares engine.",
    author="Bruno Lima Netto",
    author_email="brunolimanetto@gmail.com",
    url="https://github.com/BruninLima",
    keywords=["Adaptive", "Filtering", "RLS", "Recursive", "Least", "Squares", "Regression"],
    python_requires=">=3.8",
    install_requires=[
        'numpy',
    ],
    extras_require={
        'plot': ['matplotlib'],
        'test': ['pytest', 'scipy', 'matplotlib'],
    },

    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Science/Research',
        'Topic :: Software Development :: Libraries',
        'Programming Language :: Python :: 3'
    ]

)
