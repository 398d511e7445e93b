from setuptools import setup, find_packages

setup(
    name="feed-highlighter",
    version="1.0.0",
    description="Highlight, hide or de-emphasize feed articles based on keyword lists",
    author="Michael Elliott",
    author_email="melliott@anaconda.com",
    url="https://github.com/melliott-anaconda/feed-highlighter",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "selenium>=4.1.0",
        "beautifulsoup4>=4.10.0",
        "webdriver-manager>=3.5.2",
        "playwright>=1.40.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        'console_scripts': [
            'highlighter=highlighter.__main__:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
)
