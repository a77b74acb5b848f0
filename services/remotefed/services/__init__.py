"""Remote user federation services."""
