"""
Application services that sit above the components (seeding, startup tasks).
"""
