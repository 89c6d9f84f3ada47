"""Site layout and route entries shared by the endpoint tests."""

TEMPLATES = {
    "www/books/list.hbs": (
        "{{> header}}<ul>{{#results}}{{> book_item}}{{/results}}</ul>"
        "{{^results}}<p>No books</p>{{/results}}{{> footer}}"
    ),
    "www/books/book_item.hbs": "<li>{{title}} ({{year}})</li>",
    "www/books/header.hbs": "<h1>Book Catalog</h1>",
    "www/search/results.hbs": "{{> header}}{{#results}}<p>{{title}}</p>{{/results}}{{> footer}}",
    "shared/header.hbs": "<h1>Site</h1>",
    "shared/footer.hbs": "<footer>sqlite-serve</footer>",
    "shared/broken.hbs": "{{> header}}{{> nav}}",
}


BOOKS_ROUTE = {
    "path": "/books",
    "query": "SELECT title, year, cover FROM books WHERE genre = ? ORDER BY year",
    "template": "list.hbs",
    "params": ["$arg_genre"],
}


SEARCH_ROUTE = {
    "path": "/search",
    "query": (
        "SELECT title FROM books WHERE year >= :min_year AND year <= :max_year "
        "ORDER BY year"
    ),
    "template": "results.hbs",
    "params": [":min_year $arg_min", {"label": ":max_year", "variable": "$arg_max"}],
}
