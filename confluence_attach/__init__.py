"""Push and pull single Confluence page attachments from the command line."""

__version__ = "0.1.0"
