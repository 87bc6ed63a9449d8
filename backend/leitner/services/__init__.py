"""Services package for the Leitner card store and scheduler."""
