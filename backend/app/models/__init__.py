# Models package init
"""
Task Board Backend — Document Shapes
=====================================

What:  Builders and field lists for the documents stored in MongoDB.
How:   Plain dicts (the store is schemaless); these modules are the single
       place that decides which keys a stored document carries.
"""
