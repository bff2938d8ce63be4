# src/regionsnap/__init__.py

"""
RegionSnap: a desktop utility to capture a dragged region of the screen.

This package contains the selection logic, the capture overlay, screen
grabbing and the save workflow.
"""

__version__ = "0.1.0"
__author__ = "RegionSnap Developer"
__email__ = "developer@example.com"
