# max page size
LIMIT_LIST = 1000
