"""
Stable Admin

Internal admin API for provisioning equestrian tenant organizations
(stables, trainers, enterprises) with their owners, roles, members,
horses, consumables and service pricing.
"""

__version__ = "1.0.0"
