"""VoyageHub — personal travel-journal API.

Users register, log in, and keep journal entries that only they can
see or change. Identity is carried by signed bearer tokens.
"""

__version__ = "0.1.0"
