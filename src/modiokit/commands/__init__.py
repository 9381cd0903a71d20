"""Built-in CLI commands: ``translate``, ``page`` and the ``config`` group."""
