"""IBC application that creates and drives one reflect account per channel."""