"""Products page: fetch, paginate and format the shop's catalog."""
