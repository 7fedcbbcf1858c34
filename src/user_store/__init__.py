"""Personal user-record store backed by a tab-separated text file."""
