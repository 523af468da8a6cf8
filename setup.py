# pylint: disable=missing-module-docstring
# ruff: noqa

from pathlib import Path

from setuptools import find_packages, setup


def read_long_description() -> str:
    """Return README contents for PyPI description."""
    readme_path = Path(__file__).with_name("README.md")
    return readme_path.read_text(encoding="utf-8") if readme_path.exists() else "Weibo Trend Analyzer"


setup(
    name="weibo-trend-analyzer",
    version="0.1.0",
    description="Weibo trending topics to Claude-generated HTML product-idea reports",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    python_requires=">=3.11",
    packages=find_packages(
        include=[
            "trend_engine",
            "trend_engine.*",
            "fetchers",
            "fetchers.*",
            "report_engine",
            "report_engine.*",
        ]
    ),
    include_package_data=True,
    install_requires=[
        "httpx>=0.26",
        "anthropic>=0.40",
        "pydantic>=2.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "weibo-trend-report = trend_engine.cli_entrypoints:analyze",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
