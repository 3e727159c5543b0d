"""Administrative scripts for the OAuth2 storage."""
