"""A FIFO queue contract backed by ordered key-value storage."""