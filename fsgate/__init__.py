"""fsgate: a file-system gateway that confines agent file edits to a base directory.

This package exposes submodules directly; keep __all__ empty to avoid static checks
that expect module-level symbols.
"""

__all__: list[str] = []
