"""vsc-share: share extensions, settings, snippets and keybindings between VSCode-like editors."""

__version__ = "0.1.0"
