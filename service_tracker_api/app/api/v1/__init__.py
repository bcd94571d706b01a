"""
Version 1 of the Service Tracker API.
"""
