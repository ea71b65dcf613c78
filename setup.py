from setuptools import setup, find_packages

setup(
    name="rps_cam",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "opencv-python>=4.8.0",
        "numpy>=1.21.0",
        "torch>=2.0.0",
        "torchvision>=0.15.0",
        "matplotlib>=3.5.0",
        "scikit-learn>=1.2.0",
        "tqdm>=4.64.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "rps-train=rps_dl.training.train:main",
            "rps-live=rps_cam.live_rps:main",
        ],
    },
    python_requires=">=3.8",
    author="RPS-Cam Team",
    description="Rock/Paper/Scissors webcam classifier: training, evaluation and live detection",
    long_description="Train a small grayscale CNN on rock/paper/scissors images, inspect its per-class accuracy and confusion matrix, and run it live against a webcam",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
