"""Configuration command for LtQuiz."""


def config(state, args, props):
    """Show the active configuration."""
    theme = state.config.theme
    print(f"[{theme.kind}] Theme: {theme.name}")
