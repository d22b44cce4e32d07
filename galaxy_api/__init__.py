# _*_ coding: utf-8 _*_
"""GalaxyAPI - CoMIT backend gateway."""

__version__ = "1.0.0"
