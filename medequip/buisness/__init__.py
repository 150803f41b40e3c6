"""
Business layer: domain services over the record collections
"""
