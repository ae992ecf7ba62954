"""SEO helpers: hreflang, breadcrumbs, metadata, structured data, sitemap."""
