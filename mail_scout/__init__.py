# mail_scout/__init__.py
"""
MailScout package initializer.
Defines package version; the CLI lives in ``mail_scout.cli``.
"""
__version__ = "0.1.0"
