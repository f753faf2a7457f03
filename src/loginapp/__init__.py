"""Login App - HTTP front end for the credential lifecycle."""
