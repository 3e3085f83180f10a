"""Server-side functions installed alongside the schema (Postgres only)."""

from sqlalchemy import text

# Called over PostgREST as /rpc/increment_counter. The add happens in a
# single UPDATE, so concurrent callers never lose an increment.
INCREMENT_COUNTER = text(
    """
    CREATE OR REPLACE FUNCTION increment_counter(
        target_table text,
        target_column text,
        row_id uuid,
        delta integer DEFAULT 1
    ) RETURNS integer
    LANGUAGE plpgsql
    SECURITY DEFINER
    SET search_path = public
    AS $$
    DECLARE
        matched integer;
    BEGIN
        IF (target_table, target_column) NOT IN (
            ('posts', 'like_count'),
            ('posts', 'comment_count'),
            ('comments', 'like_count')
        ) THEN
            RAISE EXCEPTION 'counter %.% is not incrementable', target_table, target_column;
        END IF;

        EXECUTE format(
            'UPDATE %I SET %I = %I + $1 WHERE id = $2',
            target_table, target_column, target_column
        ) USING delta, row_id;

        GET DIAGNOSTICS matched = ROW_COUNT;
        RETURN matched;
    END;
    $$;
    """
)

SERVER_FUNCTIONS = [INCREMENT_COUNTER]
