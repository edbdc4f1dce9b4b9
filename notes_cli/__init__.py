"""Terminal client for the local Ocean Notes API."""
