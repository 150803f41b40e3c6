"""
Services Layer
Presentation-specific helpers used by the routes.

Services should:
- Not modify records or apply business rules
- Aggregate and filter domain records for display
- Be stateless
"""
