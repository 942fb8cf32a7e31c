"""
Core domain logic: metric calculators, comparative analysis, exam rules
and reports.
"""
