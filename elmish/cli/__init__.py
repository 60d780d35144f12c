"""Terminal REPL for driving a mounted component."""
