"""
Automated airline check-in with bounded retries, forensic artifacts and a
single e-mail report per run.
"""

__version__ = "0.1.0"
