"""
surgeon: a stateful refactoring protocol engine.

An editor opens a session, points it at a working directory, then lists,
inspects and runs transformations. Results come back as unified diff
patch files or edited content.

Submodules:
- protocol: session state, commands, dispatch and result translation
- refactoring: transformation interface, registry and built-ins
- filesystem: file system backends and change records
- text: edit sets and patches
"""

__version__ = "0.1.0"
