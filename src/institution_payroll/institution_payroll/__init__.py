"""Institution payroll package.

Feature modules (calendar_days, leave, attendance, payroll, invoice) each keep
their pure derivation code apart from the repository/service/controller layers
that fetch rows from the record store and hand results to the UI.
"""
