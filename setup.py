from setuptools import find_packages, setup

setup(
    name='bayesdepth',
    version='0.1.0',
    description='Bayesian depth prior for earthquake location from zone statistics and slab models',
    packages=find_packages(include=['bayesdepth', 'bayesdepth.*']),
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'pandas',
        'PyYAML',
        'ruamel.yaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.10',
    ],
    entry_points={
        "console_scripts": [
            "bdepth-generate-config=bayesdepth.cli_tools.generate_config:main",
        ],
    },
)
