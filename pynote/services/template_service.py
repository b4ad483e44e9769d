from __future__ import annotations

import re
from dataclasses import dataclass

from pynote.domain.interfaces import ISettingsService
from pynote.domain.models import Template

CODE_TEMPLATES: dict[str, str] = {
    "csharp": """using System;
using System.Linq;
using System.Collections.Generic;

class Program {
  static void Main() {
    int n = int.Parse(Console.ReadLine());
    Console.WriteLine("You entered: " + n);
  }
}""",
    "cpp": """#include <bits/stdc++.h>
using namespace std;

#define ll long long
#define pb push_back
#define all(x) x.begin(), x.end()
#define MOD 1000000007

int main() {
  ios_base::sync_with_stdio(false);
  cin.tie(NULL);


  return 0;
}""",
    "python": """import sys
input = sys.stdin.readline

def main():
  pass

if __name__ == "__main__":
  main()""",
    "java": """import java.util.*;
import java.io.*;

public class Main {
  public static void main(String[] args) {

  }
}""",
}

BUILTIN_NAMES: dict[str, str] = {
    "csharp": "C# Template",
    "cpp": "C++ Template",
    "python": "Python Template",
    "java": "Java Template",
}

# Keys of user-added templates: lowercase letters, digits and hyphens.
TEMPLATE_KEY_RE = re.compile(r"[a-z0-9-]+")

NEW_TEMPLATE_CODE = "// Your template code here\n"


def is_builtin(key: str) -> bool:
    return key in CODE_TEMPLATES


@dataclass
class TemplateService:
    """
    Built-in code templates plus user overrides and custom-only templates.

    Custom entries live in settings as {key: {name, code}}. A custom entry
    with a built-in key overrides the built-in code; built-ins themselves can
    be reset but never deleted.
    """

    settings: ISettingsService

    def get_template(self, key: str) -> str | None:
        custom = self.settings.get_custom_templates().get(key)
        if custom is not None:
            return custom["code"]
        return CODE_TEMPLATES.get(key)

    def get_all_templates(self) -> list[Template]:
        custom = self.settings.get_custom_templates()
        out: list[Template] = []
        for key, name in BUILTIN_NAMES.items():
            override = custom.get(key)
            out.append(
                Template(
                    key=key,
                    name=name,
                    code=override["code"] if override else CODE_TEMPLATES[key],
                    is_custom=override is not None,
                )
            )
        for key, entry in custom.items():
            if key not in CODE_TEMPLATES:
                out.append(Template(key=key, name=entry["name"], code=entry["code"], is_custom=True))
        return out

    def update_template(self, key: str, code: str) -> None:
        custom = self.settings.get_custom_templates()
        existing = custom.get(key)
        name = existing["name"] if existing else BUILTIN_NAMES.get(key, "Custom Template")
        custom[key] = {"name": name, "code": code}
        self.settings.set_custom_templates(custom)

    def add_custom_template(self, key: str, name: str, code: str) -> bool:
        custom = self.settings.get_custom_templates()
        if key in custom or key in CODE_TEMPLATES:
            return False
        custom[key] = {"name": name, "code": code}
        self.settings.set_custom_templates(custom)
        return True

    def delete_custom_template(self, key: str) -> bool:
        if key in CODE_TEMPLATES:
            return False
        custom = self.settings.get_custom_templates()
        if custom.pop(key, None) is None:
            return False
        self.settings.set_custom_templates(custom)
        return True

    def reset_template(self, key: str) -> None:
        custom = self.settings.get_custom_templates()
        if custom.pop(key, None) is not None:
            self.settings.set_custom_templates(custom)
