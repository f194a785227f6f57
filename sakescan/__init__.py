"""
Sake Scan Catalog Import Tool

Modules:
    models      - Data models (ScrapedSake, MatchDecision, CatalogEntry, SakeRow)
    common      - Shared utilities (config loader, settings, logging, errors)
    scraping    - Firecrawl client, catalog page fetcher, image search
    extraction  - Record, keyword and image extraction from scraped pages
    catalog     - Supabase REST/storage client and catalog repository
    importing   - Catalog matching, import apply step, review summaries
    api         - Request handlers for the admin back-office
"""
