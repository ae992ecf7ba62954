"""URL routing rules for CMS pages."""
