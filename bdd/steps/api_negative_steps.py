"""
Negative-path API Step Definitions

These steps go through the client's unvalidated calls so that error
statuses come back as plain responses instead of raising.
"""

from behave import when, then


def _store_response(context, response):
    context.api_response = response
    context.response_status = response.status_code
    context.response_body = context.api_client.read_body(response)


@when("I request a user with ID {user_id:d}")
def step_request_user(context, user_id):
    _store_response(context, context.api_client.raw_get(f"/users/{user_id}"))


@when("I request posts for user ID {user_id:d}")
def step_request_user_posts(context, user_id):
    _store_response(context, context.api_client.raw_get(f"/users/{user_id}/posts"))


@when("I create a post with empty title and body")
def step_create_empty_post(context):
    response, body = context.api_client.create_post({"userId": 1, "title": "", "body": ""})
    context.api_response = response
    context.response_status = response.status_code
    context.response_body = body


@when("I update post with ID {post_id:d}")
def step_update_post(context, post_id):
    _store_response(
        context,
        context.api_client.raw_put(
            f"/posts/{post_id}",
            {"title": "Updated Title", "body": "Updated Body", "userId": 1},
        ),
    )


@when('I request an invalid endpoint "{endpoint}"')
def step_request_invalid_endpoint(context, endpoint):
    _store_response(context, context.api_client.raw_get(endpoint))


@then("the response should return status {expected_status:d}")
def step_response_status(context, expected_status):
    actual = context.response_status
    assert actual == expected_status, f"Expected status {expected_status} but got {actual}"
    context.logger.info(f"Response status: {actual}")


@then("the response body should be empty")
def step_response_body_empty(context):
    assert context.response_body == {}, f"Expected an empty body, got {context.response_body!r}"


@then("the response should return an empty array")
def step_response_empty_array(context):
    body = context.response_body
    assert isinstance(body, list), f"Expected a JSON array, got {type(body).__name__}"
    assert len(body) == 0, f"Expected no items, got {len(body)}"


@then("the created post should have empty title and body")
def step_created_post_empty(context):
    assert context.response_body.get("title") == ""
    assert context.response_body.get("body") == ""


@then("I should receive an error message")
def step_error_message(context):
    assert context.response_body is not None
    context.logger.info(f"Error response: {context.response_body!r}")
