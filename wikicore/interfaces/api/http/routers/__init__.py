"""Feature routers (documents, public share, wikis, stars)."""
