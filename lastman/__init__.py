"""
lastman
-------
Scripted onboarding tutorial for Last Man Standing.
"""

__version__ = "0.1.0"
