"""Core configuration, exceptions, logging and terminal output."""
