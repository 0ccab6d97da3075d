"""Core data structures for dts2rs: front end, type system, IR, errors"""
