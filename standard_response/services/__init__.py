"""Services package — query parsing and response assembly, never HTTP wiring.

Files:
  pagination.py   — limit/offset parsing with defaults and declared bounds
  sorting.py      — ``sort`` expression parsing and allow-list checks
  filtering.py    — ``filter`` expression grammar (``;`` = AND, ``,`` = OR)
  params.py       — StandardParams, the per-request mutable descriptor bag
  registry.py     — RouteMetadataRegistry, route identity -> declared metadata
  validator.py    — ResponseValidator, optional per-item predicate gate
  interceptor.py  — StandardResponseInterceptor, parse -> handler -> envelope

Rule: no FastAPI imports here. Routing glue lives in standard_response/routing/.
"""
