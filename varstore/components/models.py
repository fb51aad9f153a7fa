import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# key of the variable map inside the document
VARIABLES_KEY = "EnvironmentVariables"

class ConfigurationDocument(BaseModel):
    # unknown top-level keys are kept so writes don't drop them, and only the
    # alias counts as the variable map
    model_config = ConfigDict(extra="allow")

    environment_variables: Optional[Dict[str, Any]] = Field(None, alias=VARIABLES_KEY)

    def saved_value(self, name: str) -> Optional[str]:
        """string form of a saved variable, None when absent"""
        if not self.environment_variables or name not in self.environment_variables:
            return None
        return stringify(self.environment_variables[name])

    def set_variable(self, name: str, value: str):
        if self.environment_variables is None:
            self.environment_variables = {}
        self.environment_variables[name] = value

    def saved_variables(self) -> Dict[str, str]:
        variables = {}
        for name, value in (self.environment_variables or {}).items():
            text = stringify(value)
            if text is not None:
                variables[name] = text
        return variables

    def to_json(self) -> str:
        data = self.model_dump(by_alias=True, exclude_none=False)
        if data.get(VARIABLES_KEY) is None:
            # never write an explicit null for a map we didn't create
            data.pop(VARIABLES_KEY, None)
        return json.dumps(data, ensure_ascii=False, indent=2)

def stringify(value: Any) -> Optional[str]:
    # hand-edited documents may hold numbers, booleans or nested json
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)
