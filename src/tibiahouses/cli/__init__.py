"""
Command-line interface modules.

Provides CLI entry points for:
- api_server: Start the REST API
- scrape: Scrape one town (live or from a saved page) to JSON
"""
