"""
Commands for LtQuiz.
Each command is a function ``(state, args, props)`` registered through
``ltquiz.registry.CommandBuilder``.
"""
