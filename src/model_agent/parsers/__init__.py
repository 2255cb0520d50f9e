from model_agent.parsers.base import Parser
from model_agent.parsers.mysql import MySQLParser, parse_ddl

__all__ = ["Parser", "MySQLParser", "parse_ddl"]
