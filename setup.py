from setuptools import setup, find_packages

setup(
    name="KP_BENCH",
    version="0.1.0",
    packages=find_packages(include=["kp_bench", "kp_bench.*"]),
    package_data={
        "kp_bench": ["configs/*.yaml"],
    },
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "pandas",
        "PyYAML",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
