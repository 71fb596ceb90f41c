"""Portfolio backend — content API for a personal portfolio site."""
