"""
JSON Placeholder API Step Definitions

Happy-path steps for the user and post workflows. Scenario state lives on
the behave context, which drops it when the scenario ends.
"""

from behave import given, when, then

from apisuite.core.helpers import (
    get_random_user,
    get_random_post,
    validate_post_id,
    console_log_simple,
    POST_ID_MIN,
    POST_ID_MAX,
)
from apisuite.core.models import Post


@given("I get all users from the API")
def step_get_all_users(context):
    """Fetch every user."""
    context.all_users = context.api_client.get_users()
    assert len(context.all_users) > 0, "Expected the API to return at least one user"
    context.logger.info(f"✓ Retrieved {len(context.all_users)} users from API")


@when("I select a random user")
def step_select_random_user(context):
    context.selected_user = get_random_user(context.all_users)
    assert context.selected_user.id > 0
    context.logger.info(
        f"✓ Selected random user: {context.selected_user.name} (ID: {context.selected_user.id})"
    )


@then("I should log the user's email address")
def step_log_user_email(context):
    email = context.selected_user.email
    console_log_simple("User Email", email)
    assert "@" in email, f"Not an email address: {email!r}"


@when("I get all posts for the selected user")
def step_get_user_posts(context):
    """Fetch the selected user's posts."""
    user_id = context.selected_user.id
    context.user_posts = context.api_client.get_user_posts(user_id)
    assert len(context.user_posts) > 0, f"User {user_id} has no posts"
    context.logger.info(f"✓ Retrieved {len(context.user_posts)} posts for user {user_id}")


@then(f"all posts should have valid Post IDs between {POST_ID_MIN} and {POST_ID_MAX}")
def step_validate_post_ids(context):
    invalid = [post.id for post in context.user_posts if not validate_post_id(post.id)]
    assert not invalid, f"Post IDs outside {POST_ID_MIN}-{POST_ID_MAX}: {invalid}"
    context.logger.info(
        f"✓ All {len(context.user_posts)} posts have valid IDs ({POST_ID_MIN}-{POST_ID_MAX})"
    )


@then("I should log the title and ID for each post")
def step_log_posts(context):
    print("\n=== User's Posts ===")
    for post in context.user_posts:
        print(f"Post ID: {post.id} | Title: {post.title}")
    print("===================\n")


@when("I select a random post from the user's posts")
def step_select_random_post(context):
    context.selected_post = get_random_post(context.user_posts)
    context.logger.info(f"✓ Selected random post: ID {context.selected_post.id}")


@when('I modify the post title to "{new_title}"')
def step_modify_post_title(context, new_title):
    """Send a PUT with the new title and keep the returned post."""
    post = context.selected_post
    context.updated_post_title = new_title
    response, body = context.api_client.update_post(
        post.id,
        Post(id=None, user_id=post.user_id, title=new_title, body=post.body),
    )

    assert response.ok, f"Update returned {response.status_code}"
    context.selected_post = Post.from_dict(body)
    context.logger.info(f"✓ Modified post {context.selected_post.id} title")


@then("I should verify the post was updated")
def step_verify_post_updated(context):
    actual = context.selected_post.title
    expected = context.updated_post_title
    assert actual == expected, f"Expected title {expected!r} but got {actual!r}"
    context.logger.info(f'✓ Post title verified: "{actual}"')


@then("I should log the updated post ID and title")
def step_log_updated_post(context):
    print("\n=== Updated Post ===")
    console_log_simple("Post ID", context.selected_post.id)
    console_log_simple("Title", context.selected_post.title)
    print("===================\n")


@when('I create a new post with title "{title}" and body "{body}"')
def step_create_post(context, title, body):
    user_id = context.selected_user.id
    response, response_body = context.api_client.create_post(
        {"userId": user_id, "title": title, "body": body}
    )
    context.created_post_response = response
    context.created_post_body = response_body
    context.logger.info(f"✓ Created new post for user {user_id}")


@then("the post creation should return the correct response")
def step_verify_creation_status(context):
    # The service answers a successful POST with 201
    status = context.created_post_response.status_code
    assert status == 201, f"Expected status 201 but got {status}"
    context.logger.info("✓ Received correct response status: 201")


@then("I should verify the created post has valid data")
def step_verify_created_post(context):
    body = context.created_post_body

    assert body.get("id") is not None, "Created post has no ID"
    assert body.get("userId") == context.selected_user.id
    assert body.get("title"), "Created post has an empty title"
    assert body.get("body"), "Created post has an empty body"

    print("\n=== Created Post ===")
    console_log_simple("Post ID", body["id"])
    console_log_simple("User ID", body["userId"])
    console_log_simple("Title", body["title"])
    console_log_simple("Body", body["body"])
    print("===================\n")

    context.logger.info("✓ All API operations completed successfully!")
