#/project/parse/cli_to_xml.py

"""
ISC License

Copyright (c) 2023 Eric Chickering <eric.chickering@gmail.com>

Permission to use, copy, modify, and/or distribute this software for any
purpose with or without fee is hereby granted, provided that the above
copyright notice and this permission notice appear in all copies.

THE SOFTWARE IS PROVIDED "AS IS" AND THE AUTHOR DISCLAIMS ALL WARRANTIES
WITH REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF
MERCHANTABILITY AND FITNESS. IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR
ANY SPECIAL, DIRECT, INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES
WHATSOEVER RESULTING FROM LOSS OF USE, DATA OR PROFITS, WHETHER IN AN ACTION
OF CONTRACT, NEGLIGENCE OR OTHER TORTIOUS ACTION, ARISING OUT OF OR IN
CONNECTION WITH THE USE OR PERFORMANCE OF THIS SOFTWARE.

"""

import re

QUOTE = '"'

# Quoted segments stay whole, everything else splits on whitespace
TOKEN_PATTERN = re.compile(r'(?:[^\s"]+|"[^"]*")+')


def tokenize(cli_cmd):
    return TOKEN_PATTERN.findall(cli_cmd or '')


def is_quoted(token):
    return len(token) > 1 and token.startswith(QUOTE) and token.endswith(QUOTE)


def convert_cli_to_xml(cli_cmd):
    """
    Convert a CLI style command into the nested XML the op API expects.

    'show interface "management"' -> '<show><interface>management</interface></show>'
    """
    xml_cmd = ''
    open_tags = []

    for part in tokenize(cli_cmd):
        if is_quoted(part):
            xml_cmd += part[1:-1]
        else:
            xml_cmd += f'<{part}>'
            open_tags.append(part)

    while open_tags:
        xml_cmd += f'</{open_tags.pop()}>'

    return xml_cmd


def is_xml_command(command):
    command = command.strip()
    return command.startswith('<') and command.endswith('>')


def to_xml_command(command):
    """ Return XML commands untouched, convert anything else from CLI syntax. """
    if is_xml_command(command):
        return command.strip()
    return convert_cli_to_xml(command)
