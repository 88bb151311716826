"""
Chart Processors
================
One module per chart type. Each exposes:

- process(table, config)        -> chart-specific data shape
- validate(table, config)       -> ColumnValidation
- get_required_columns(config)  -> list of column names
- DATA_MAPPING_EXAMPLE          -> example mapping shown to users
"""
