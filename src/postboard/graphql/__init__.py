"""
GraphQL API for Postboard
"""
