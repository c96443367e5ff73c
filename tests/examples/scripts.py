"""Example build scripts used across the test suite.

The scripts cover the shapes the package scanner has to cope with:
scripts with and without a package declaration, declarations hidden
behind comments, and scripts whose body is not valid at all.
"""

PLAIN_SCRIPT = (
    'plugins {\n'
    '    `java-library`\n'
    '}\n'
)

PACKAGED_SCRIPT = (
    '#!/usr/bin/env kotlin\n'
    '/*\n'
    ' * Copyright header /* nested */ still a comment\n'
    ' */\n'
    '\n'
    '/** Conventions for ACME projects. */\n'
    '// line comment\n'
    'package org.acme\n'
    '\n'
    'import org.gradle.api.JavaVersion\n'
    '\n'
    'tasks.register("hello") {\n'
    '    doLast { println("Hello") }\n'
    '}\n'
)

BROKEN_SCRIPT = (
    'package org.acme.broken\n'
    '\n'
    'this is { not "valid kotlin\n'
)
