"""Subcommands of the konf command line: cleanup, completion, delete, import, namespace, set, shellwrapper and version."""