"""
Firebase, identity and media collaborators
"""
