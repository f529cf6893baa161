"""Places, bookmarkable URLs and navigation history."""
