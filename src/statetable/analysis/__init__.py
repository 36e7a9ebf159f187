"""Matrix views of a built Table (numpy / scipy.sparse)."""
