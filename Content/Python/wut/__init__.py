# What Uses This (WUT) package
#
# Modules:
#   wut_entry   - public entry points for UI / console
#   wut_session - per-window search + deletion state
#   wut_index   - reverse dependency index
#   wut_closure - transitive dependant search
#   wut_host    - asset host interface + in-memory host
#   wut_unreal  - Unreal Editor host + Output Log forwarding
#   wut_report  - human-readable reporting
#   wut_errors  - exception types
