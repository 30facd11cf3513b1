"""Canvas admin backend: the posts API behind the admin panel's editor."""
