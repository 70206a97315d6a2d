"""
Transforms sub-package for gkc-ingest.

Contains the small, independently testable steps the delimited parser
applies to tokenized rows:

- empty.py: Drop rows whose cells are all blank.
- keys.py: Resolve column names positionally, build records, and strip
  reserved keys.
"""
