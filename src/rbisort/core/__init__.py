"""Import detection, sorting and file reconstruction."""
