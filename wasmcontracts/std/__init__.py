"""Storage, message types, IBC types and mocks that the contracts run against."""