[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "tcpchat"
version = "0.1.0"
description = "Small TCP echo and broadcast chat servers and clients built on the standard socket module"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "socket", "echo", "chat", "server", "client", "selectors"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tcpchat-echo-server = "tcpchat.echo_server:main"
tcpchat-echo-client = "tcpchat.echo_client:main"
tcpchat-server = "tcpchat.chat_server:main"
tcpchat-client = "tcpchat.chat_client:main"

[tool.setuptools.packages.find]
include = ["tcpchat", "tcpchat.*"]

[tool.pytest.ini_options]
addopts = "-ra"
