"""Administrative command line interface."""
