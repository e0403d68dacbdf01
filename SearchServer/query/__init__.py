from .parser import Query, QueryParser, parse_query
