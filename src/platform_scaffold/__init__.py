"""Platform scaffolding for Flutter apps and modules.

Writes the Android and iOS glue files (plugin registrants, local.properties,
Generated.xcconfig, module host templates) into a project tree. Template files
are never overwritten once present; generated files are rewritten only when
their content changes.
"""
