[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "archetypal"
version = "0.1.0"
description = "An archetype-based Entity Component System with cached queries, layered renderers and parent/child hierarchies."
requires-python = ">=3.10"
dependencies = []
keywords = ["ecs", "entity-component-system", "game", "archetype", "gamedev"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["archetypal"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
