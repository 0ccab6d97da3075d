"""Builders for dts2rs

Modules:
- ModuleBuilder: Walks module declarations and assembles the Module IR
- MemberBuilder: Binds class and interface members
- translate_enum: Translates enum declarations
"""

from dts2rs.builders.enum_translator import translate_enum, capitalize_member
from dts2rs.builders.member_builder import MemberBuilder
from dts2rs.builders.module_builder import ModuleBuilder

__all__ = [
    'ModuleBuilder',
    'MemberBuilder',
    'translate_enum',
    'capitalize_member',
]
