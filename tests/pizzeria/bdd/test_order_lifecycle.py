"""BDD tests for the order lifecycle."""

from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/order_lifecycle.feature")


@given(
    parsers.cfparse(
        'the catalog has a "{pizza_type}" pizza "{name}" made of "{first}" at {first_price:f} and "{second}" at {second_price:f}'
    )
)
def catalog_with_pizza(catalog, pizza_type, name, first, first_price, second, second_price):
    catalog.create_ingredient(first, first_price)
    catalog.create_ingredient(second, second_price)
    catalog.create_pizza(name, pizza_type)
    catalog.add_ingredient_to_pizza(name, first)
    catalog.add_ingredient_to_pizza(name, second)


@given(parsers.cfparse('a client "{email}" is logged in'), target_fixture="session")
def logged_in_client(directory, alice_info, email):
    directory.register(email, "correct-horse", alice_info)
    return directory.login(email, "correct-horse").value


@when("the client starts an order")
def start_order(desk, session, context):
    context["order"] = desk.start_order(session).value


@when(parsers.cfparse('the client adds {quantity:d} "{pizza}" to the order'))
def add_pizza(desk, session, context, quantity, pizza):
    context["outcome"] = desk.add_pizza(session, context["order"], pizza, quantity)


@when("the client validates the order")
def validate_order(desk, session, context):
    context["outcome"] = desk.validate(session, context["order"])


@when("the client cancels the order")
def cancel_order(desk, session, context):
    context["outcome"] = desk.cancel(session, context["order"])


@when("the operator processes pending orders")
def process_pending(ledger, context):
    context["batch"] = ledger.process_pending()


@when(parsers.cfparse('the client rates "{pizza}" {rating:d}'))
def rate_pizza(book, session, context, pizza, rating):
    context["outcome"] = book.rate(session, pizza, rating)


@then(parsers.cfparse('the order is "{status}"'))
def order_has_status(ledger, context, status):
    assert ledger.find(context["order"].number).status == status


@then("the processed batch contains the order")
def batch_contains_order(context):
    assert [o.number for o in context["batch"]] == [context["order"].number]


@then("the order no longer exists")
def order_is_gone(ledger, context):
    assert ledger.find(context["order"].number) is None


@then(parsers.cfparse('the operation fails with "{error}"'))
def operation_fails(context, error):
    assert not context["outcome"].ok
    assert context["outcome"].error.value == error


@then(parsers.cfparse('the average rating of "{pizza}" is {average:f}'))
def average_rating_is(book, pizza, average):
    assert book.average_rating(pizza).value == average
