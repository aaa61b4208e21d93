# console, std and os are provided by the host runtime.
from constant import name

from hello_host.greeting import format_greeting

console.log(format_greeting(name))  # noqa: F821
console.log(std.keys())  # noqa: F821
console.log(os.keys())  # noqa: F821

std.loadFile("./constant.py", console.log)  # noqa: F821
