"""
todo-list: a single-user task list with local persistence.

Packages:
- tasks/: data structures, errors and the authoritative TaskStore
- storage/: key-value persistence backends
- core/: ports (interfaces), app state and the transient message board
- connectors/: console renderer and REPL
- cli/: composition root, slash commands and the entrypoint
"""
