"""Branch Timeclock package.

Feature modules (attendance, advances, payroll, ...) each carry a domain model,
a repository protocol with a MySQL implementation, a service and a thin Flask
controller. The punch sequencer, day partitioning and payroll aggregation are
pure functions over already-loaded records.
"""
