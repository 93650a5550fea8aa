from lispy.reader.parser import parse, ParseNode
from lispy.reader.reader import read

__all__ = ["parse", "ParseNode", "read"]
