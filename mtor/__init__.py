"""
MTOR Evolution - coaching backend for client assessments, lab exams and
training protocols.
"""
__version__ = "1.0.0"
