"""HTAN data catalogue resolution utilities.

Turns the denormalized Synapse dataset dump into resolved files and
atlases suitable for portal filtering and display.
"""

__version__ = '0.1.0'
