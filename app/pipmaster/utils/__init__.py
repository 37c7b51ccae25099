"""Shell helpers and Rich console formatting."""
