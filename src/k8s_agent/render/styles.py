"""Inline CSS used by the generated HTML fragments."""

CONTAINER = (
    "font-family: 'Segoe UI', Arial, sans-serif; line-height: 1.6; color: #333; "
    "max-width: 800px; margin: 0 auto; padding: 20px;"
)

PRE = "background-color: #f5f5f5; padding: 15px; border-radius: 5px; overflow-x: auto;"
INLINE_CODE = (
    "background-color: #f5f5f5; padding: 2px 4px; border-radius: 3px; "
    "font-family: monospace;"
)

H1 = "color: #2c3e50; border-bottom: 2px solid #3498db; padding-bottom: 10px;"
H2 = "color: #2c3e50; border-bottom: 1px solid #3498db; padding-bottom: 8px;"
H3 = "color: #2c3e50; margin-top: 15px;"

UL = "margin-left: 20px;"

ERROR_CONTAINER = (
    "font-family: 'Segoe UI', Arial, sans-serif; padding: 20px; "
    "border-left: 5px solid #e74c3c; background-color: #fadbd8; margin: 15px 0; "
    "border-radius: 0 5px 5px 0; box-shadow: 0 2px 4px rgba(0,0,0,0.1);"
)
ERROR_HEADING = "color: #c0392b; margin-top: 0; font-size: 18px;"
ERROR_PARAGRAPH = "margin: 10px 0; line-height: 1.5;"
