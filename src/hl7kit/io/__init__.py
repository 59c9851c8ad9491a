"""Reading and writing the line-oriented HL7 file format."""

from hl7kit.io.file_reader import HL7FileReader
from hl7kit.io.file_writer import HL7FileWriter
from hl7kit.io.opener import open_hl7_file

__all__ = ["HL7FileReader", "HL7FileWriter", "open_hl7_file"]
