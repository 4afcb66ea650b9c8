"""
FeatherGuard - HTTP API
"""
