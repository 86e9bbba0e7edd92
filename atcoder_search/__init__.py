"""
AtCoder search backend.

Indexes problems and user rankings into a Solr search engine and serves
structured search requests against it.
"""

__version__ = "0.1.0"
