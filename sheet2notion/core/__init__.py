"""
Validation and conversion core: models, schema registry, validators, rules
and property conversion.
"""
