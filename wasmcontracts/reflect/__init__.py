"""A contract that re-emits messages on behalf of its owner."""