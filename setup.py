from setuptools import setup, find_packages
import os

# Read version
def get_version():
    version_path = os.path.join(os.path.dirname(__file__), "VERSION.txt")
    with open(version_path, "r") as vfile:
        return vfile.read().strip()

setup(
    name="assetnav",
    version=get_version(),
    description="AssetNav: project folder, file tree and document path resolution for shared project assets",
    long_description=open("README.md", encoding="utf-8").read() if os.path.isfile("README.md") else "",
    long_description_content_type="text/markdown",
    author="Pro AV Solutions",
    packages=find_packages(include=["assetnav", "assetnav.*", "mcp_server", "mcp_server.*"]),
    install_requires=[
        "mcp[cli]<2",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
    include_package_data=True,
    package_data={
        "": ["VERSION.txt"],
    },
    entry_points={
        "console_scripts": [
            "assetnav=assetnav.cli:main",
            "assetnav-mcp=mcp_server.__main__:main"
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "License :: OSI Approved :: MIT License",
    ],
    zip_safe=False,
)
