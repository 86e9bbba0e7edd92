"""
Adapters for external systems: the relational store and the Solr engine.
"""
