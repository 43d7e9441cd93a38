[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xmppstanza"
version = "0.1.0"
description = "Parse, build and serialize XMPP stanzas and common protocol extensions"
requires-python = ">=3.10"
dependencies = []
keywords = ["xmpp", "jabber", "stanza", "xml", "messaging"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: XMPP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xmppstanza"]

[tool.pytest.ini_options]
addopts = "-ra"
