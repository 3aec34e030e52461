"""
Listing pipeline: lookup, filtering, forms and submission
"""
