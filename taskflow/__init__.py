"""
TaskFlow data-access layer.

Accounts, sessions and personal tasks persisted as JSON blobs in a
key-value store, exposed through async Auth and Task services.
"""

__version__ = "1.0.0"
