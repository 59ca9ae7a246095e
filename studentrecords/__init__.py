"""Student records kept in a plain-text file, with a Tk window to manage them."""

__version__ = "1.0.0"
__all__ = ["models", "storage", "registry", "gui"]