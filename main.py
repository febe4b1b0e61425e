from consolette import *

__prog__ = "demo"

application = Application(
    "demo",
    version="0.0.0",
    description="Sample application built with consolette",
    meta={"Repository": "consolette"},
)


@application.command(
    "greet",
    descr="Greets someone",
    arguments=[Argument.required("name", "Who to greet"), Argument.array("others", "More people to greet")],
    options=[
        Option.no_value("yell", "y", "Shout the greeting"),
        Option.required("greeting", "g", "Greeting to use", default="Hello"),
    ],
)
def greet(input, output):
    for name in (input.argument_value("name"), *input.argument_list("others")):
        text = f"{input.option_value('greeting')} {name}"
        output.message(text.upper() if input.is_option_set("yell") else text)


def ask_name(input, output, ask):
    if not input.is_argument_set("name"):
        return input.with_argument("name", ask("Who should be greeted?"))


@application.command("user:count", descr="Counts to a number with a progress bar")
def count(input, output):
    with Progress(input, output, "counting") as progress:
        progress.start(10)
        for _ in range(10):
            progress.advance()


def greet_user(input, output):
    output.message(f"Welcome {input.argument_value('name')}")


application.register("user:greet", Command(
    greet_user,
    descr="Greets a user, asking for the name when missing",
    arguments=[Argument.optional("name", "Who to greet")],
    interact=ask_name,
))


if __name__ == '__main__':
    invoke(application)
