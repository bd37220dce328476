"""
Access Firewall service package.
"""
