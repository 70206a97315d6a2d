"""
Parsers sub-package for gkc-ingest.

Contains parsers that convert the raw text of a fetched sheet export
into a list of schema-free records.

Design: Strategy Pattern
- base.py defines the BaseParser ABC and the tagged ParseResult.
- delimited.py implements DelimitedParser for CSV/semicolon exports,
  plus the ``parse_table()`` / ``normalize()`` convenience functions.

The CacheGateway (cache.py) accepts any BaseParser.
"""
